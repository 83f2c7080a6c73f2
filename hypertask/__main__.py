from hypertask.cli import main

main()
