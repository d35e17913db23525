from icie.cli import main

main()
