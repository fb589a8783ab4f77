"""
Sample command sets used by the discovery tests.
"""
