"""Small cross-cutting helpers."""

from sisyphus.helpers.debug import log_call

__all__ = ["log_call"]
