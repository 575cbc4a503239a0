from lispcalc.main import main

main()
