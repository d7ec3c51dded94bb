from oneclick.cli import main

main()
