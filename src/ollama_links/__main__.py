from ollama_links.cli import main

main()
