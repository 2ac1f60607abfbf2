"""
Message model shared by the queue core and its views.
"""
