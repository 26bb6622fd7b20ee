"""Entry point for the notes MCP server."""

from notes_mcp.server import create_server


def main() -> None:
    """Run the notes MCP server."""
    server = create_server()
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
