import os

# APP_ENV value -> settings module under config/.
_ENVIRONMENTS = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    """Dotted path of the settings module for APP_ENV; unknown values mean development."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ENVIRONMENTS.get(env, 'development')}"
