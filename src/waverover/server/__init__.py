"""MCP server for waverover.

Hosts the FastMCP rover tools behind a FastAPI application serving the
MCP SSE transport plus operator endpoints (health, registered rovers).
"""
