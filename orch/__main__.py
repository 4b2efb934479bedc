from orch.cli.app import main

main()
