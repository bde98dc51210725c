from davsession.cli import main

main()
