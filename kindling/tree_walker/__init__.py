"""
The tree-walking run-time: values, evaluation, deferred tasks, and the Engine that drives them.
"""
