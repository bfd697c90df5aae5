from jvm_cli import main

main()
