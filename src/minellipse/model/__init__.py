"""
The MODEL layer contains the exact geometry of the smallest enclosing ellipse.
It has NO knowledge of the command line or of logging setup.
It deals with Points, Predicates, Conics, the Boundary state and its I/O.
"""
