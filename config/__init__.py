"""
Project configuration: paths and analysis settings
"""
