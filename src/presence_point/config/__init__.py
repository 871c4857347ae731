import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "presence_point.config.production"

    if env in {"test", "testing"}:
        return "presence_point.config.testing"

    return "presence_point.config.development"
