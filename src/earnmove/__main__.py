from earnmove.cli import main

main()
