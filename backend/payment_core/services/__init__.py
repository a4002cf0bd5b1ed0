"""
Services layer - Payment procedure and its collaborators
"""
