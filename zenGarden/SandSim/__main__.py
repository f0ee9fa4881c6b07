from zenGarden.SandSim.runner import main

main()
