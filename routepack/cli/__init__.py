"""
routepack CLI
"""
