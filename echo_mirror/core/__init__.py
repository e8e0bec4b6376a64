"""
Core types shared by the stage chain and the handlers.
"""
