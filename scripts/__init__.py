"""
scripts package marker.
"""
