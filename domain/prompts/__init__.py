"""Task descriptions and system prompts for the remote automation worker."""

from .system_prompt import APPLY_SYSTEM_PROMPT, CONTACT_SEARCH_SYSTEM_PROMPT  # noqa: F401
from .task_prompts import build_apply_task_prompt, build_contact_search_task_prompt  # noqa: F401

__all__ = [
    "APPLY_SYSTEM_PROMPT",
    "CONTACT_SEARCH_SYSTEM_PROMPT",
    "build_apply_task_prompt",
    "build_contact_search_task_prompt",
]
