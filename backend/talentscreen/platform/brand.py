"""Centralized brand configuration for user-facing copy."""

BRAND_NAME = "TalentScreen"
BRAND_DOMAIN = "recrutamentoia.com.br"
BRAND_PUBLIC_URL = f"https://{BRAND_DOMAIN}"
BRAND_APP_DESCRIPTION = "Recruiting back-office: résumé screening and behavioral profiling"
