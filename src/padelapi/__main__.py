from padelapi.app import main

main()
