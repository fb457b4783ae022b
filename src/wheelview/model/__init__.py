"""
The MODEL layer contains pure data structures and geometry helpers.
It has NO knowledge of touch handling, physics integration or rendering.
"""
