"""
Subway Admin Backend
"""
