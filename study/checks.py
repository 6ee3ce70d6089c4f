from django.conf import settings
from django.core.checks import Error, register


@register()
def gemini_api_key_check(app_configs, **kwargs):
    """A missing API key is a startup error, not a per-request one."""
    if getattr(settings, "GEMINI_API_KEY", None):
        return []
    return [
        Error(
            "GEMINI_API_KEY is not set.",
            hint="Set GEMINI_API_KEY (or GOOGLE_API_KEY) in the environment or .env.",
            id="study.E001",
        )
    ]
