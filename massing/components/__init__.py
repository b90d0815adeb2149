"""
Components of the massing editor.

Geometry primitives, coordinate projection, the building store, the tool
state machine, export serializers and site import, wired together per
document by EditorEngine.
"""
