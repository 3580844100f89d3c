"""
JWT authentication that also accepts the HttpOnly access-token cookie and
refuses users whose account or company is no longer allowed in.
"""
from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed

from core.companies.models import CompanyStatus

COMPANY_STATUS_MESSAGES = {
    CompanyStatus.SUSPENDED: "Your company account has been suspended. Please contact support.",
    CompanyStatus.ARCHIVED: "Your company account has been archived. Please contact support.",
}


def company_access_error(user):
    """Return the refusal message for a user whose company is not active, else None."""
    company = getattr(user, 'company', None)
    if company is None:
        return None
    return COMPANY_STATUS_MESSAGES.get(company.status)


class CookieJWTAuthentication(JWTAuthentication):
    """
    Bearer header first, then the `access_token` cookie.

    simplejwt already rejects inactive users; suspended or archived
    companies are rejected here.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get(settings.AUTH_COOKIE['NAME'])

        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        user = self.get_user(validated_token)

        message = company_access_error(user)
        if message:
            raise AuthenticationFailed(message, code='company_inactive')

        return user, validated_token
