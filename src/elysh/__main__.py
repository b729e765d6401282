from elysh.cli import main

main()
