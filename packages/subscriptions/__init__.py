"""
Subscriptions package - tracks user subscriptions to paid services and
answers filtered listing and spend questions over them.
"""
