"""
selstore CLI

Commands:
- selstore key - Print the storage key for a root and selector
- selstore has - Check whether a traversal is stored
- selstore records - Replay a stored traversal
- selstore decode - Decode a raw record blob file
"""
