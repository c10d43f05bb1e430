"""
UI Module - Web and terminal front ends for the chat service
"""
