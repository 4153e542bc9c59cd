from .callsite import CallSite, capture_callsite

__all__ = ["CallSite", "capture_callsite"]
