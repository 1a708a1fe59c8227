"""Controllers and composition for the record forms.

``form_controller`` and ``greeting_controller`` orchestrate use cases against
viewmodel state; ``list_cache`` holds list query results; ``runtime`` wires
everything from settings; ``main`` is the command-line front end.
"""
