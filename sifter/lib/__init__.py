from .paths import format_path, parse_path, to_path

__all__ = ["format_path", "parse_path", "to_path"]
