"""
The MODEL layer contains pure data structures and layout math.
It has NO knowledge of the GUI (Qt) or of the drawing surface.
It deals with values, tiers, angles and radii.
"""
