'''Spatial analyses of voting methods over the two-dimensional ideology plane.'''
