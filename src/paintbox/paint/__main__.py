from paintbox.paint.app import main

main()
