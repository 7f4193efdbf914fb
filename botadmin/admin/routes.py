"""Admin console routes: login/logout, dashboard and one page + form actions per resource."""

from collections.abc import Awaitable
from typing import Any

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from botadmin.admin.dashboard import collect_stats
from botadmin.admin.resources import ArrayResource, Resources, summarize_buyers
from botadmin.admin.session import AdminContext, admin_page, get_gate, require_admin
from botadmin.admin.toast import set_toast
from botadmin.errors import MalformedStoredData, RecordNotFound, ValidationFailure
from botadmin.models import BlacklistItem, FaqItem, PromoItem, SopItem
from botadmin.utils.logger import get_logger

logger = get_logger("botadmin.admin.routes")

router = APIRouter()

LOGIN_ERROR = "Password salah!"
NOT_FOUND_MSG = "Data tidak ditemukan, muat ulang halaman lalu coba lagi."


def _resources(request: Request) -> Resources:
    return request.app.state.resources


def render(request: Request, name: str, ctx: AdminContext | None = None, status_code: int = 200, **context: Any) -> HTMLResponse:
    """Render a template with the pending toast (if any) from ctx."""
    return request.app.state.templates.TemplateResponse(
        request,
        name,
        {"toast": ctx.toast if ctx else None, **context},
        status_code=status_code,
    )


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=302)


async def run_action(request: Request, back: str, action: Awaitable[Any], success_msg: str) -> RedirectResponse:
    """Await a mutation, turn the outcome into a toast and redirect back to the list page."""
    try:
        await action
    except ValidationFailure as e:
        set_toast(request.session, "danger", str(e))
    except RecordNotFound as e:
        logger.warning("resource.not_found", resource=e.resource, ref=e.ref)
        set_toast(request.session, "danger", NOT_FOUND_MSG)
    except MalformedStoredData as e:
        logger.error("resource.malformed_file", filename=e.filename, error=e.error)
        set_toast(request.session, "danger", f"File {e.filename} rusak dan tidak diubah. Perbaiki manual dulu.")
    else:
        set_toast(request.session, "success", success_msg)
    return redirect(back)


def _list_page(request: Request, ctx: AdminContext, template: str, resource: ArrayResource, key: str) -> HTMLResponse:
    result = resource.load()
    return render(request, template, ctx, **{key: result.items, "data_error": result.error})


# --- Login / logout ---


@router.get("/login", response_class=HTMLResponse)
async def login_form(request: Request):
    return render(request, "login.html", error=None)


@router.post("/login")
async def login_submit(request: Request, password: str = Form("")):
    if get_gate(request).login(request.session, password):
        return redirect("/dashboard")
    return render(request, "login.html", error=LOGIN_ERROR)


@router.get("/logout")
async def logout(request: Request):
    get_gate(request).logout(request.session)
    return redirect("/login")


# --- Dashboard ---


@router.get("/", response_class=HTMLResponse)
@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request, ctx: AdminContext = Depends(admin_page)):
    stats = collect_stats(_resources(request))
    return render(request, "dashboard.html", ctx, stats=stats)


# --- Produk ---


@router.get("/produk", response_class=HTMLResponse)
async def produk_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return render(request, "produk.html", ctx, produk=_resources(request).products.list())


@router.post("/produk/save", dependencies=[Depends(require_admin)])
async def produk_save(request: Request, produk: str = Form(""), content: str = Form("")):
    products = _resources(request).products
    return await run_action(request, "/produk", products.save(produk, content), "Produk berhasil disimpan.")


@router.post("/produk/delete", dependencies=[Depends(require_admin)])
async def produk_delete(request: Request, produk: str = Form("")):
    products = _resources(request).products
    return await run_action(request, "/produk", products.delete(produk), "Produk berhasil dihapus.")


# --- FAQ ---


@router.get("/faq", response_class=HTMLResponse)
async def faq_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return _list_page(request, ctx, "faq.html", _resources(request).faq, "faq")


@router.post("/faq/save", dependencies=[Depends(require_admin)])
async def faq_save(request: Request, idx: str = Form(""), question: str = Form(""), answer: str = Form("")):
    faq = _resources(request).faq
    item = FaqItem(question=question, answer=answer)
    return await run_action(request, "/faq", faq.save(idx, item), "FAQ berhasil disimpan.")


@router.post("/faq/delete", dependencies=[Depends(require_admin)])
async def faq_delete(request: Request, idx: str = Form("")):
    return await run_action(request, "/faq", _resources(request).faq.delete(idx), "FAQ dihapus.")


# --- SOP ---


@router.get("/sop", response_class=HTMLResponse)
async def sop_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return _list_page(request, ctx, "sop.html", _resources(request).sop, "sop")


@router.post("/sop/save", dependencies=[Depends(require_admin)])
async def sop_save(request: Request, idx: str = Form(""), trigger: str = Form(""), response: str = Form("")):
    sop = _resources(request).sop
    item = SopItem.from_form(trigger, response)
    return await run_action(request, "/sop", sop.save(idx, item), "SOP berhasil disimpan.")


@router.post("/sop/delete", dependencies=[Depends(require_admin)])
async def sop_delete(request: Request, idx: str = Form("")):
    return await run_action(request, "/sop", _resources(request).sop.delete(idx), "SOP dihapus.")


# --- Promo ---


@router.get("/promo", response_class=HTMLResponse)
async def promo_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return _list_page(request, ctx, "promo.html", _resources(request).promo, "promo")


@router.post("/promo/save", dependencies=[Depends(require_admin)])
async def promo_save(
    request: Request,
    idx: str = Form(""),
    banner: str = Form(""),
    active: str | None = Form(None),
):
    promo = _resources(request).promo
    # Checkbox semantics: any submitted value means checked
    item = PromoItem(banner=banner, active=bool(active))
    return await run_action(request, "/promo", promo.save(idx, item), "Promo berhasil disimpan.")


@router.post("/promo/delete", dependencies=[Depends(require_admin)])
async def promo_delete(request: Request, idx: str = Form("")):
    return await run_action(request, "/promo", _resources(request).promo.delete(idx), "Promo dihapus.")


# --- Claim log ---


@router.get("/claim", response_class=HTMLResponse)
async def claim_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return _list_page(request, ctx, "claim.html", _resources(request).claim, "claim")


@router.post("/claim/resolve", dependencies=[Depends(require_admin)])
async def claim_resolve(request: Request, idx: str = Form("")):
    claim = _resources(request).claim
    return await run_action(request, "/claim", claim.mark(idx), "Claim di-mark as resolved.")


# --- Blacklist ---


@router.get("/blacklist", response_class=HTMLResponse)
async def blacklist_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return _list_page(request, ctx, "blacklist.html", _resources(request).blacklist, "blacklist")


@router.post("/blacklist/save", dependencies=[Depends(require_admin)])
async def blacklist_save(request: Request, user: str = Form(""), reason: str = Form("")):
    blacklist = _resources(request).blacklist
    item = BlacklistItem(user=user, reason=reason)
    return await run_action(request, "/blacklist", blacklist.save(None, item), "User masuk blacklist.")


@router.post("/blacklist/delete", dependencies=[Depends(require_admin)])
async def blacklist_delete(request: Request, idx: str = Form("")):
    blacklist = _resources(request).blacklist
    return await run_action(request, "/blacklist", blacklist.delete(idx), "Blacklist dihapus.")


# --- Buyers ---


@router.get("/buyers", response_class=HTMLResponse)
async def buyers_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    result = _resources(request).buyers.load()
    return render(
        request,
        "buyers.html",
        ctx,
        buyers=result.items,
        buyers_aggregated=summarize_buyers(result.items),
        data_error=result.error,
    )


# --- Claims replace / reset ---


@router.get("/claims-replace", response_class=HTMLResponse)
async def claims_replace_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return _list_page(request, ctx, "claims_replace.html", _resources(request).claims_replace, "claims_replace")


@router.post("/claims-replace/resolve", dependencies=[Depends(require_admin)])
async def claims_replace_resolve(request: Request, index: str = Form("")):
    claims = _resources(request).claims_replace
    return await run_action(request, "/claims-replace", claims.mark(index), "Claim ditandai selesai.")


@router.get("/claims-reset", response_class=HTMLResponse)
async def claims_reset_page(request: Request, ctx: AdminContext = Depends(admin_page)):
    return _list_page(request, ctx, "claims_reset.html", _resources(request).claims_reset, "claims_reset")


@router.post("/claims-reset/mark", dependencies=[Depends(require_admin)])
async def claims_reset_mark(request: Request, index: str = Form("")):
    claims = _resources(request).claims_reset
    return await run_action(request, "/claims-reset", claims.mark(index), "Reset ditandai selesai.")
