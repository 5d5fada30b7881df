"""
Powerplay - T20 fantasy league match simulation
"""
