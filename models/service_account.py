from pydantic import BaseModel, Field
from typing import Optional

class ServiceAccountInfo(BaseModel):
    """Firebase service account key, as found in a downloaded key file"""
    type: str = Field(..., description="Account type, normally 'service_account'")
    project_id: str = Field(..., description="Firebase project ID")
    private_key_id: Optional[str] = Field(None, description="Key identifier")
    private_key: str = Field(..., description="PEM encoded private key")
    client_email: str = Field(..., description="Service account email")
    client_id: Optional[str] = Field(None, description="Service account client ID")
    auth_uri: Optional[str] = Field(None, description="OAuth2 auth endpoint")
    token_uri: str = Field("https://oauth2.googleapis.com/token", description="OAuth2 token endpoint")
    auth_provider_x509_cert_url: Optional[str] = None
    client_x509_cert_url: Optional[str] = None

    def __repr__(self) -> str:
        # Keep key material out of tracebacks and logs
        return f"ServiceAccountInfo(project_id={self.project_id!r}, client_email={self.client_email!r})"

    __str__ = __repr__
