import logging

from django.contrib import messages
from django.contrib.auth import authenticate, logout
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST
from rest_framework.exceptions import APIException

from cart import services as cart_services
from order import services as order_services
from product.filters import ProductFilter
from product.models import Category, Product
from user.tokens import clear_auth_cookies, set_auth_cookies
from .forms import (
    ORDERING_CHOICES, CheckoutForm, LoginForm, OrderStatusFilterForm,
    QuantityForm, ReviewForm,
)

logger = logging.getLogger(__name__)

PAGE_SIZE = 12


def describe_error(exc):
    """Flatten an APIException detail into one readable line."""
    detail = exc.detail
    while isinstance(detail, (list, dict)) and detail:
        detail = next(iter(detail.values())) if isinstance(detail, dict) else detail[0]
    return str(detail)


def home(request):
    products = Product.objects.prefetch_related("images")[:8]
    return render(request, "web/home.html", {"products": products})


def product_list(request):
    qs = Product.objects.prefetch_related("images", "categories")
    qs = ProductFilter(request.GET, queryset=qs).qs

    search = request.GET.get("search", "").strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))

    ordering = request.GET.get("ordering", "-created_at")
    if ordering not in dict(ORDERING_CHOICES):
        ordering = "-created_at"
    qs = qs.order_by(ordering, "-id")

    page = Paginator(qs, PAGE_SIZE).get_page(request.GET.get("page"))
    return render(request, "web/product_list.html", {
        "page": page,
        "categories": Category.objects.all(),
        "ordering_choices": ORDERING_CHOICES,
        "current": {
            "search": search,
            "category": request.GET.get("category", ""),
            "ordering": ordering,
        },
    })


def product_detail(request, pk):
    product = get_object_or_404(
        Product.objects.prefetch_related("images", "categories", "reviews__user"), pk=pk
    )
    return render(request, "web/product_detail.html", {
        "product": product,
        "quantity_form": QuantityForm(),
        "review_form": ReviewForm(),
    })


@login_required
@require_POST
def review_create(request, pk):
    product = get_object_or_404(Product, pk=pk)
    form = ReviewForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Please fix the review form: rating 1-5, title and comment are required.")
        return redirect("web:product-detail", pk=pk)

    review = form.save(commit=False)
    review.product = product
    review.user = request.user
    try:
        with transaction.atomic():
            review.save()
    except IntegrityError:
        messages.error(request, "You have already reviewed this product.")
    else:
        messages.success(request, "Thanks for your review!")
    return redirect("web:product-detail", pk=pk)


@login_required
def cart_view(request):
    cart = cart_services.get_cart(request.user)
    return render(request, "web/cart.html", {"cart": cart})


@login_required
@require_POST
def cart_add(request, pk):
    product = get_object_or_404(Product, pk=pk)
    form = QuantityForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Quantity must be a positive whole number.")
        return redirect("web:product-detail", pk=pk)
    try:
        cart_services.add_item(request.user, product, form.cleaned_data["quantity"])
    except APIException as exc:
        messages.error(request, describe_error(exc))
        return redirect("web:product-detail", pk=pk)
    messages.success(request, f"{product.name} added to your cart.")
    return redirect("web:cart")


@login_required
@require_POST
def cart_update(request, item_id):
    form = QuantityForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Quantity must be a positive whole number.")
        return redirect("web:cart")
    try:
        cart_services.update_item(request.user, item_id, form.cleaned_data["quantity"])
    except APIException as exc:
        messages.error(request, describe_error(exc))
    return redirect("web:cart")


@login_required
@require_POST
def cart_remove(request, item_id):
    try:
        cart_services.remove_item(request.user, item_id)
    except APIException as exc:
        messages.error(request, describe_error(exc))
    return redirect("web:cart")


@login_required
def checkout(request):
    cart = cart_services.get_cart(request.user)
    form = CheckoutForm(request.POST or None)

    if request.method == "POST" and form.is_valid():
        try:
            order = order_services.create_order(
                request.user,
                shipping_address=form.shipping_address(),
                billing_address=form.billing_address(),
                payment_method=form.cleaned_data["payment_method"],
                payment_token=form.cleaned_data["payment_token"],
            )
        except APIException as exc:
            messages.error(request, describe_error(exc))
        else:
            messages.success(request, f"Order #{order.pk} placed. Thank you!")
            return redirect("web:orders")

    return render(request, "web/checkout.html", {"cart": cart, "form": form})


@login_required
def order_list(request):
    filter_form = OrderStatusFilterForm(request.GET or None)
    qs = order_services.order_queryset().filter(user=request.user)
    if filter_form.is_valid() and filter_form.cleaned_data["status"]:
        qs = qs.filter(status=filter_form.cleaned_data["status"])
    page = Paginator(qs, PAGE_SIZE).get_page(request.GET.get("page"))
    return render(request, "web/orders.html", {"page": page, "filter_form": filter_form})


def login_view(request):
    form = LoginForm(request.POST or None)
    next_url = request.POST.get("next") or request.GET.get("next") or reverse("web:home")
    if not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        next_url = reverse("web:home")

    if request.method == "POST" and form.is_valid():
        user = authenticate(
            request,
            email=form.cleaned_data["email"],
            password=form.cleaned_data["password"],
        )
        if user is not None:
            return set_auth_cookies(redirect(next_url), user)
        logger.info("Failed storefront login for %s", form.cleaned_data["email"])
        messages.error(request, "Invalid credentials")

    return render(request, "web/login.html", {"form": form, "next": next_url})


@require_POST
def logout_view(request):
    logout(request)
    return clear_auth_cookies(redirect("web:home"))
