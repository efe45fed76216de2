"""Pure helpers for atpath."""
