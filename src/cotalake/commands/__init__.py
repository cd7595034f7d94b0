"""Command-line entry points. 🖥️"""
