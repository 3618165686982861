"""
Core value objects, codecs and the prefix registry.

Independent of any particular document model; the binding package builds
on top of this.
"""
