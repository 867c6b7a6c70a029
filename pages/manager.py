"""经理功能页面"""
import datetime
import streamlit as st
import pandas as pd
from services.reservation import ReservationService
from utils.exceptions import AuthorizationError, HotelError


def _denied(e):
    st.error(f"⛔️ {e}")


def page_update_room(ctx):
    st.title("🛠️ 更新房间信息")
    with st.form("update_room"):
        c1, c2 = st.columns(2)
        hotel_id = c1.text_input("酒店编号")
        room_number = c2.text_input("房间号")
        price = c1.text_input("新房价", placeholder="大于0的整数")
        image_url = c2.text_input("图片地址", placeholder="不超过30个字符")
        submitted = st.form_submit_button("保存", type="primary")

    if submitted:
        try:
            ReservationService.update_room(ctx, hotel_id, room_number, price, image_url)
        except AuthorizationError as e:
            _denied(e)
            return
        except HotelError as e:
            st.error(f"无法更新房间: {e}")
            return
        st.success(f"房间 {room_number} 已更新")


def page_recent_updates(ctx):
    st.title("🕘 最近房间更新")
    try:
        rows = ReservationService.recent_updates(ctx)
    except AuthorizationError as e:
        _denied(e)
        return
    except HotelError as e:
        st.error(str(e))
        return
    if not rows:
        st.info("暂无更新记录")
        return
    st.dataframe(pd.DataFrame([{
        "更新编号": r["update"], "酒店": r["hotel"], "房间": r["room"],
        "时间": r["update_time"].strftime("%Y-%m-%d %H:%M")
    } for r in rows]), use_container_width=True)


def page_booking_history(ctx):
    st.title("📚 酒店预订历史")
    today = datetime.date.today()
    with st.form("booking_history"):
        c1, c2 = st.columns(2)
        start = c1.date_input("开始日期", value=today - datetime.timedelta(days=30))
        end = c2.date_input("结束日期", value=today)
        submitted = st.form_submit_button("查询", type="primary")

    if submitted:
        try:
            rows = ReservationService.booking_history(ctx, start, end)
        except AuthorizationError as e:
            _denied(e)
            return
        except HotelError as e:
            st.error(str(e))
            return
        if not rows:
            st.info("该区间没有预订")
            return
        st.dataframe(pd.DataFrame([{
            "预订编号": r["booking"], "顾客": r["customer"], "酒店": r["hotel"],
            "房间": r["room"], "日期": r["date"].strftime("%m/%d/%Y")
        } for r in rows]), use_container_width=True)
        st.caption(f"共 {len(rows)} 条")


def page_regular_customers(ctx):
    st.title("⭐ 常客排行")
    with st.form("regular_customers"):
        hotel_id = st.text_input("酒店编号")
        submitted = st.form_submit_button("查询", type="primary")

    if submitted:
        try:
            rows = ReservationService.regular_customers(ctx, hotel_id)
        except AuthorizationError as e:
            _denied(e)
            return
        except HotelError as e:
            st.error(str(e))
            return
        if not rows:
            st.info("暂无常客")
            return
        st.dataframe(pd.DataFrame([{
            "顾客编号": r["id"], "姓名": r["name"], "预订次数": r["bookings"]
        } for r in rows]), use_container_width=True)


def page_repair_request(ctx):
    st.title("🔧 提交维修申请")
    with st.form("repair_request"):
        c1, c2, c3 = st.columns(3)
        hotel_id = c1.text_input("酒店编号")
        room_number = c2.text_input("房间号")
        company_id = c3.text_input("维修公司编号")
        submitted = st.form_submit_button("提交", type="primary")

    if submitted:
        try:
            repair_id, request_id = ReservationService.request_repair(ctx, hotel_id, room_number, company_id)
        except AuthorizationError as e:
            _denied(e)
            return
        except HotelError as e:
            st.error(str(e))
            return
        st.success(f"已为酒店 #{hotel_id} 房间 #{room_number} 向公司 #{company_id} 提交维修申请 "
                   f"(维修 #{repair_id}, 申请 #{request_id})")


def page_repair_history(ctx):
    st.title("🧾 维修申请历史")
    try:
        rows = ReservationService.repair_history(ctx)
    except AuthorizationError as e:
        _denied(e)
        return
    except HotelError as e:
        st.error(str(e))
        return
    if not rows:
        st.info("暂无维修申请")
        return
    st.dataframe(pd.DataFrame([{
        "申请编号": r["request"], "公司": r["company"], "酒店": r["hotel"],
        "房间": r["room"], "日期": r["date"].strftime("%m/%d/%Y")
    } for r in rows]), use_container_width=True)
