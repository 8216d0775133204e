from .extractor import extract_metadata, extract_value, looks_like_artifact

__all__ = ["extract_metadata", "extract_value", "looks_like_artifact"]
