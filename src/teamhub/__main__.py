from teamhub.cli import main

main()
