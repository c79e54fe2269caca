"""
ColorWeaver Services
"""
