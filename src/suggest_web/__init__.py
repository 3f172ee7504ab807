"""Flask JSON API over suggest.Engine (python -m suggest_web --catalog FILE)."""
