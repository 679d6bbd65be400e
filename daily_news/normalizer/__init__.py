from .news_normalizer import normalize_results, base_score, format_viewers

__all__ = ["normalize_results", "base_score", "format_viewers"]
