"""Personal finance tracker: account management core."""
