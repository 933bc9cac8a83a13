"""Command line interface for LangSift."""
