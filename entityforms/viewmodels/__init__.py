"""ViewModel package for form UI state.

Call context:
    ``entityforms/app`` controllers own one viewmodel each and drive its state
    transitions; views read drafts, status lines and greeting text from here.

Dependencies:
    Modules in this package depend on domain types and lightweight formatting
    helpers only. Port calls and use-case orchestration remain outside.
"""
