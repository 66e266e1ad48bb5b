from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class HarnessSettings(BaseModel):
    """Snapshot of the settings consumed by the harness components"""

    base_url: str = "https://the-internet.herokuapp.com"
    api_base_url: str = "https://jsonplaceholder.typicode.com"
    timeout: int = Field(default=10, ge=0)
    browser_type: str = "chrome"
    headless: bool = True
    poll_interval: float = Field(default=0.5, gt=0)
    http_pool_size: int = Field(default=5, ge=1)
    http_timeout: Optional[float] = 30.0


class EnvironmentVariables(BaseModel):
    """Model representing environment variables"""

    variables: Dict[str, str] = Field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Get an environment variable value"""
        return self.variables.get(name, default)

    def set(self, name: str, value: str) -> None:
        """Set an environment variable value"""
        self.variables[name] = value
