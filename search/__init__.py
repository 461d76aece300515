from search.usage import DEFAULT_PATTERNS, EXCLUDED_DIRS, find_usages

__all__ = ["DEFAULT_PATTERNS", "EXCLUDED_DIRS", "find_usages"]
