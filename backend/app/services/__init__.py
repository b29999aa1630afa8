"""
Extraction pipeline services: schema translation, retry, prompt, Gemini client.
"""
