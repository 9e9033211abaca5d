"""Relay that reposts TikTok links through an embed-friendly mirror."""
