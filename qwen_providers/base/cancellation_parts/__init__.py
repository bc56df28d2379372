"""Cancellation implementation parts; import from ``qwen_providers.base.cancellation``."""
