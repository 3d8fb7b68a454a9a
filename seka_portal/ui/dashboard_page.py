"""NiceGUI dashboard page with the embedded assistant widget."""

import logging
import os

from nicegui import ui

from seka_portal.agent.chat_agent import get_agent_service
from seka_portal.chat.controller import TextStreamer
from seka_portal.chat.stream_client import ApiStreamClient
from seka_portal.models import DashboardCard, NavLink
from seka_portal.ui.chat_widget import chat_widget

logger = logging.getLogger(__name__)

SCHOOL_NAME = "โรงเรียนเซกา"
SCHOOL_OFFICE = "สำนักงานเขตพื้นที่การศึกษามัธยมศึกษาบึงกาฬ"

DASHBOARD_CARDS = [
    DashboardCard(
        title="จัดการข้อมูลนักเรียน",
        description="เพิ่ม ลบ และแก้ไขข้อมูลส่วนตัวและข้อมูลการศึกษาของนักเรียน",
        icon="groups",
    ),
    DashboardCard(
        title="รายงานและสถิติ",
        description="ดูและส่งออกรายงานผลการเรียน สถิติการเข้าเรียน และข้อมูลภาพรวม",
        icon="pie_chart",
    ),
    DashboardCard(
        title="ตารางเรียนและกิจกรรม",
        description="จัดการตารางสอน ตารางสอบ และดูกิจกรรมต่างๆ ของโรงเรียน",
        icon="calendar_month",
    ),
    DashboardCard(
        title="ประกาศ",
        description="ติดตามข่าวสารและประกาศสำคัญจากทางโรงเรียน",
        icon="campaign",
    ),
]

CONNECTED_LINKS = [
    NavLink(
        label="จัดการชั้นเรียน",
        url="https://classroom.google.com/",
        icon="co_present",
        external=True,
    ),
    NavLink(
        label="NORA (Google Sites)",
        url="https://sites.google.com/",
        icon="public",
        external=True,
    ),
]

SETTINGS_LINKS = [
    NavLink(label="โปรไฟล์ของฉัน", icon="manage_accounts"),
    NavLink(label="การแจ้งเตือน", icon="notifications"),
    NavLink(label="ลักษณะที่ปรากฏ", icon="palette"),
]

PAGE_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Prompt:wght@400;500;600&family=Poppins:wght@400;600;700&display=swap"
      rel="stylesheet">
<style>
    body { background: #0b1026; color: white; font-family: 'Prompt', sans-serif; }
    .font-poppins { font-family: 'Poppins', 'Prompt', sans-serif; }
    .liquid-glass {
        background: rgba(255, 255, 255, 0.06);
        border: 1px solid rgba(255, 255, 255, 0.12);
        border-radius: 18px;
        backdrop-filter: blur(14px);
    }
    .dashboard-card { transition: transform 0.2s, border-color 0.2s; }
    .dashboard-card:hover { transform: translateY(-4px); border-color: rgba(255, 46, 136, 0.6); }
    .sidebar-link { color: #d1d5db; }
    .sidebar-link:hover { color: white; }
</style>
"""


def create_streamer() -> TextStreamer:
    """Pick the streamer for the chat widget.

    Talks to the API over HTTP when API_BASE_URL is set, otherwise runs the
    agent in-process.
    """
    api_base_url = os.getenv("API_BASE_URL")
    if api_base_url:
        logger.info(f"Chat widget streaming via API at {api_base_url}")
        return ApiStreamClient(api_base_url)
    return get_agent_service()


def render_link_list(links: list[NavLink], large: bool = False) -> None:
    text_size = "text-lg" if large else "text-sm"
    with ui.column().classes("gap-3"):
        for link in links:
            with ui.row().classes("items-center gap-3"):
                ui.icon(link.icon).classes("sidebar-link w-5")
                ui.link(link.label, link.url, new_tab=link.external).classes(
                    f"sidebar-link no-underline {text_size}"
                )


def render_card(card: DashboardCard) -> None:
    with ui.link(target=card.url).classes("no-underline"):
        with ui.element("div").classes("dashboard-card liquid-glass p-6 h-full"):
            with ui.row().classes("items-center gap-4 mb-4 no-wrap"):
                with ui.element("div").classes("liquid-glass p-3"):
                    ui.icon(card.icon).classes("text-2xl text-pink-500")
                ui.label(card.title).classes("text-lg font-semibold text-white font-poppins")
            ui.label(card.description).classes("text-gray-400 text-sm")


def render_mobile_menu() -> ui.left_drawer:
    with ui.left_drawer(value=False).classes("bg-slate-900/95 text-center") as drawer:
        with ui.row().classes("w-full justify-end"):
            ui.button(icon="close", on_click=drawer.hide).props("flat round color=white")
        ui.label("เมนู").classes("text-2xl font-bold text-pink-500 mb-6 font-poppins")
        ui.label("ลิงก์เชื่อมต่อ").classes("text-lg font-semibold text-white mb-2 font-poppins")
        render_link_list(CONNECTED_LINKS, large=True)
        ui.label("ตั้งค่า").classes("text-lg font-semibold text-white mt-8 mb-2 font-poppins")
        render_link_list(SETTINGS_LINKS, large=True)
    return drawer


@ui.page("/")
def dashboard_page() -> None:
    """Main dashboard page."""
    ui.add_head_html(PAGE_CSS)
    ui.dark_mode().enable()

    drawer = render_mobile_menu()

    # === Navigation Bar ===
    with ui.header().classes("bg-indigo-950/80 backdrop-blur border-b border-white/10"):
        with ui.row().classes("w-full max-w-7xl mx-auto items-center justify-between h-16"):
            with ui.row().classes("items-center gap-2 no-wrap"):
                ui.icon("school").classes("text-pink-500 text-4xl")
                with ui.column().classes("gap-0"):
                    ui.label(SCHOOL_NAME).classes("text-base md:text-lg font-semibold")
                    ui.label(SCHOOL_OFFICE).classes("text-xs opacity-80 font-poppins")
            ui.button(icon="menu", on_click=drawer.toggle).props("flat round color=white").classes(
                "lg:hidden"
            )

    # === Dashboard ===
    with ui.element("div").classes("w-full max-w-7xl mx-auto px-4 py-8"):
        with ui.element("div").classes("grid grid-cols-1 lg:grid-cols-3 gap-8"):
            with ui.element("div").classes("lg:col-span-2"):
                ui.label("แดชบอร์ดหลัก").classes(
                    "text-3xl md:text-4xl font-bold text-white font-poppins"
                )
                ui.label("ภาพรวมและทางลัดเข้าสู่ระบบ").classes("text-gray-400 mt-1 mb-8")
                with ui.element("div").classes("grid grid-cols-1 md:grid-cols-2 gap-6"):
                    for card in DASHBOARD_CARDS:
                        render_card(card)

            # Sidebar
            with ui.element("aside").classes("lg:col-span-1"):
                with ui.element("div").classes("liquid-glass p-6 mb-8"):
                    ui.label("ลิงก์เชื่อมต่อ").classes(
                        "text-lg font-semibold text-white font-poppins mb-4"
                    )
                    render_link_list(CONNECTED_LINKS)
                with ui.element("div").classes("liquid-glass p-6"):
                    ui.label("ตั้งค่า").classes("text-lg font-semibold text-white font-poppins mb-4")
                    render_link_list(SETTINGS_LINKS)

    chat_widget(create_streamer())


def main() -> None:
    ui.run(title="Seka School Portal", port=8080, reload=False)


if __name__ == "__main__":
    main()
