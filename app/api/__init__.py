"""
app/api package marker.
"""
