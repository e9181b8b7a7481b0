"""
hyperray - an interactive ray tracer for 4D scenes.

hyperray.core    vectors, bivectors and rotors in 4D
hyperray.scene   camera, controls and the editable scene
hyperray.render  GPU layouts, buffer mirrors and the compute kernel
"""

__version__ = "0.1.0"
