from ui5libgen.cli import main

main()
