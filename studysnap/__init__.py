from __future__ import annotations

"""
studysnap project package.

Loads the Celery app here so shared tasks bind to it on Django startup.
"""

from .celery import app as celery_app

__all__ = ("celery_app",)
