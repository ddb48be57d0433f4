"""Fetch WeChat articles and extract an editor-ready title and body."""
