"""Turn processing: opponent strategies, move application, and action validation.

Both the human's moves and the opponent's moves flow through here so the
controller only has to orchestrate.
"""
