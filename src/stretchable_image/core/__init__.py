"""
Core package for stretchable_image.

Contains the value types shared by composition and rasterization.
"""
