"""rulem: manage rule repositories from the terminal."""
