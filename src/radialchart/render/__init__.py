"""
The RENDER layer turns chart geometry into pixels through a DrawingSurface
(QPainter), loads the decorative overlay and produces PNG exports.
"""
