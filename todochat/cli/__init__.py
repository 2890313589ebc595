"""
CLI module - Interactive terminal interface.

Entry point: todochat.cli.main:main
"""
