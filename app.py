"""酒店预订管理系统 - 主入口

启动: streamlit run app.py -- [<dbname> <port> <user>]
不带参数时使用 HOTEL_DB_URL 配置的数据库。
"""
import streamlit as st
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from config import config, get_logger
from models import get_engine, init_db, use_database
from models.base import dispose_engine
from services.auth import AuthService
from services.session import SessionState
from utils.exceptions import HotelError
from pages import (
    page_nearby_hotels, page_rooms, page_book_room, page_my_bookings,
    page_update_room, page_recent_updates, page_booking_history,
    page_regular_customers, page_repair_request, page_repair_history
)

logger = get_logger(__name__)

USAGE = "Usage: streamlit run app.py -- <dbname> <port> <user>"


def parse_startup_args(argv):
    """解析启动参数，参数个数不对时打印用法并以非零状态退出"""
    if len(argv) == 0:
        return config.DB_URL
    if len(argv) == 3:
        dbname, port, user = argv
        return config.build_db_url(dbname, port, user)
    print(USAGE, file=sys.stderr)
    sys.exit(2)


@st.cache_resource
def connect(db_url: str):
    """连接数据库并初始化表结构，失败时清理后退出"""
    use_database(db_url)
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        init_db()
    except SQLAlchemyError as e:
        logger.error(f"数据库连接失败: {e}")
        print(f"数据库连接失败: {e}", file=sys.stderr)
        dispose_engine()
        sys.exit(1)
    logger.info(f"已连接数据库: {get_engine().url.render_as_string(hide_password=True)}")
    return db_url


def get_session_state() -> SessionState:
    if 'session' not in st.session_state:
        st.session_state.session = SessionState()
    return st.session_state.session


def check_login(session: SessionState) -> bool:
    """登录/注册界面"""
    if session.is_authenticated:
        return True

    c1, c2, c3 = st.columns([1, 2, 1])
    with c2:
        st.markdown(f"## 🏨 {config.APP_NAME}")
        t1, t2 = st.tabs(["登录", "注册"])

        with t1:
            user_id = st.text_input("用户编号")
            password = st.text_input("密码", type="password")
            if st.button("登录系统", use_container_width=True):
                try:
                    ctx = AuthService.login(user_id, password)
                except HotelError as e:
                    st.error(str(e))
                else:
                    session.sign_in(ctx)
                    st.success(f"登录成功！欢迎, {ctx.name}")
                    st.rerun()

        with t2:
            with st.form("register"):
                name = st.text_input("姓名")
                pw = st.text_input("密码", type="password", key="register_pw")
                if st.form_submit_button("创建用户", use_container_width=True):
                    try:
                        new_id = AuthService.register(name, pw)
                    except HotelError as e:
                        st.error(str(e))
                    else:
                        st.success(f"用户创建成功，您的用户编号为 {new_id}，请使用该编号登录")
    return False


def logout(session: SessionState):
    """退出登录"""
    if session.current:
        logger.info(f"用户登出: user_id={session.current.user_id}")
    session.sign_out()
    st.session_state.pop('current_page', None)
    st.rerun()


CUSTOMER_PAGES = {
    "🧭 附近酒店": page_nearby_hotels,
    "🛏️ 房态查询": page_rooms,
    "📝 预订房间": page_book_room,
    "📅 我的预订": page_my_bookings,
}

MANAGER_PAGES = {
    "🛠️ 更新房间": page_update_room,
    "🕘 最近更新": page_recent_updates,
    "📚 预订历史": page_booking_history,
    "⭐ 常客排行": page_regular_customers,
    "🔧 维修申请": page_repair_request,
    "🧾 维修历史": page_repair_history,
}


def main():
    st.set_page_config(page_title=config.APP_NAME, layout="wide", page_icon="🏨")
    connect(parse_startup_args(sys.argv[1:]))

    session = get_session_state()
    if not check_login(session):
        return
    ctx = session.current

    st.sidebar.markdown(f"👤 **{ctx.name}** (#{ctx.user_id}, {'经理' if ctx.is_manager else '顾客'})")
    st.sidebar.divider()

    pages = dict(CUSTOMER_PAGES)
    groups = {"预订": list(CUSTOMER_PAGES)}
    if ctx.is_manager:
        pages.update(MANAGER_PAGES)
        groups["酒店管理"] = list(MANAGER_PAGES)

    for group, names in groups.items():
        with st.sidebar.expander(group, expanded=True):
            for p in names:
                if st.button(p, key=f"nav_{p}", use_container_width=True):
                    st.session_state.current_page = p

    page = st.session_state.get('current_page', "🧭 附近酒店")
    if page not in pages:
        page = "🧭 附近酒店"

    st.sidebar.divider()
    if st.sidebar.button("🚪 退出登录", use_container_width=True):
        logout(session)

    pages[page](ctx)


if __name__ == '__main__':
    main()
