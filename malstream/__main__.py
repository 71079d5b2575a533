from malstream.cli import main

main()
