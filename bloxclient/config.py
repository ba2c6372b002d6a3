from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # value of the .ROBLOSECURITY cookie, with or without the ".ROBLOSECURITY=" prefix
    roblosecurity: str = ""
    users_host: str = "users.roblox.com"
    auth_host: str = "auth.roblox.com"
    api_host: str = "api.roblox.com"
    cookie_domain: str = ".roblox.com"
    request_timeout: float | None = None
    log_level: str = "INFO"
    live_tests: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
