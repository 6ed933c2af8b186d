"""Gemini Collaboration MCP Server - lets Claude query and brainstorm with Google's Gemini"""

__version__ = "1.0.0"
