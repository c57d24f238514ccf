from aviation_mcp.server import main

main()
