"""
gcloud_adc.models

pydantic models: the structural CredentialsFile, its typed per-kind variants,
and LocatorSettings.
"""
