from mcp_jina_reader.cli import main

if __name__ == "__main__":
    main()
