"""Configuration, logging and CLI plumbing shared by the dibber tools."""
