from multibuild.cli.main import main

main()
