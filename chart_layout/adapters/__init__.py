from chart_layout.adapters.normalize import normalize_entries, normalize_many

__all__ = ["normalize_entries", "normalize_many"]
