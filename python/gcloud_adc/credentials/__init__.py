"""
gcloud_adc.credentials

Locating, parsing and key extraction for Application Default Credentials.
"""
