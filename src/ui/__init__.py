"""NiceGUI interface - thin visualization layer over ChatClient.

Responsibilities:
    - Message display with live streaming updates
    - Thumbs up/down feedback controls
    - Example question cards on an empty chat
    - Dark/light theme persisted in browser storage

Contains no protocol logic. Everything goes through ChatClient.
"""
