from overlay_build import main

main()
