from mazelab.app.viewer import main

main()
