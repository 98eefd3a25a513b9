from pi.readline.cli import main

main()
