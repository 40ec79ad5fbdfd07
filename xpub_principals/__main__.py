from xpub_principals.cli import main

main()
