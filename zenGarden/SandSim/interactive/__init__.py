# -- Interactive Package -- #

'''
Pygame front end for raking the garden by hand.

Imported on demand by the runner; use
zenGarden.SandSim.interactive.gardenWindow.GardenWindow.
'''
