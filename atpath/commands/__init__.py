"""CLI commands for atpath: root, refs, resolve, suggest, mv, propagate, config."""
