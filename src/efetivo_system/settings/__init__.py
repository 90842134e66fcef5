import os


def get_settings_module() -> str:
    # Environment comes from APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "efetivo_system.settings.production"

    if env in {"test", "testing"}:
        return "efetivo_system.settings.testing"

    return "efetivo_system.settings.development"
