from .preferences import PreferenceStore

__all__ = ["PreferenceStore"]
