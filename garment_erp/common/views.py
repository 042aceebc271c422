from garment_erp.common.responses import success_response


class SuccessEnvelopeMixin:
    """List and retrieve answer with the same `{"success": true, "data": ...}` body as the actions."""

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        return success_response(response.data)

    def retrieve(self, request, *args, **kwargs):
        response = super().retrieve(request, *args, **kwargs)
        return success_response(response.data)
