from dfsol.cli import main

main()
