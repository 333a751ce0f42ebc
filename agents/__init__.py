"""Chat flows, tools and the session driver.

Modules are imported directly (``agents.augment_with_data``,
``agents.multimodal_chat``, ``agents.chat_session``) because the augmentation
flow depends on ``graph.workflow``, which in turn uses ``agents.generation``.
"""
