"""
Optimization core: objectives, search spaces, optimizer strategies, run
statistics and their configuration.
"""
