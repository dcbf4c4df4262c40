"""
Services used by the game driver: agent request payloads and game export.
"""
