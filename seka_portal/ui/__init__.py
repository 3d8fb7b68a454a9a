"""NiceGUI interface - dashboard page and assistant chat widget.

Responsibilities:
    - Navigation bar, dashboard cards, sidebar and mobile menu
    - Floating assistant button and chat dialog
    - NiceGUI implementation of the controller's ChatView

Contains no chat logic; turns are run by ChatSessionController.
"""
