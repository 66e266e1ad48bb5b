from typing import List, Literal
from pydantic import BaseModel, Field, field_validator

BrowserType = Literal["chrome", "firefox", "edge"]


class SessionOptions(BaseModel):
    """Options used to launch a browser session"""
    browser_type: BrowserType = "chrome"
    headless: bool = True
    platform_flags: List[str] = Field(default_factory=list)

    @field_validator("browser_type", mode="before")
    @classmethod
    def normalize_browser_type(cls, value):
        # Configured names are matched case-insensitively
        if isinstance(value, str):
            return value.strip().lower()
        return value
