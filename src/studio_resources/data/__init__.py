"""
Record loading and curve-settings persistence used by the CLI.
"""
