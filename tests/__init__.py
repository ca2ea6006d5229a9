"""Test suite for npcdb."""
