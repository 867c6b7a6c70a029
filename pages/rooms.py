"""房间与预订页面"""
import datetime
import streamlit as st
import pandas as pd
from services.reservation import ReservationService
from utils.exceptions import ConflictError, HotelError
from utils.helpers import format_money


def _rooms_frame(rows):
    return pd.DataFrame([{"房间": no, "价格": format_money(price)} for no, price in rows])


def page_rooms(ctx):
    st.title("🛏️ 房态查询")
    with st.form("view_rooms"):
        c1, c2 = st.columns(2)
        hotel_id = c1.text_input("酒店编号")
        date = c2.date_input("日期", value=datetime.date.today())
        submitted = st.form_submit_button("查询", type="primary")

    if submitted:
        try:
            available, booked = ReservationService.view_rooms(hotel_id, date)
        except HotelError as e:
            st.error(str(e))
            return
        st.markdown(f"### 酒店 #{hotel_id} 在 {date:%m/%d/%Y} 的空闲房间")
        if available:
            st.dataframe(_rooms_frame(available), use_container_width=True)
        else:
            st.info("该日期没有空闲房间")
        st.markdown("### 已预订房间")
        if booked:
            st.dataframe(_rooms_frame(booked), use_container_width=True)
        else:
            st.info("该日期所有房间均可预订")


def page_book_room(ctx):
    st.title("📝 预订房间")
    with st.form("book_room"):
        c1, c2, c3 = st.columns(3)
        hotel_id = c1.text_input("酒店编号")
        room_number = c2.text_input("房间号")
        date = c3.date_input("入住日期", value=datetime.date.today())
        submitted = st.form_submit_button("✅ 预订", type="primary")

    if submitted:
        try:
            price = ReservationService.book(ctx, hotel_id, room_number, date)
        except ConflictError as e:
            st.warning(f"抱歉，{e}")
            return
        except HotelError as e:
            st.error(str(e))
            return
        st.success(f"酒店 #{hotel_id} 房间 #{room_number} 已预订 {date:%m/%d/%Y}，价格: {format_money(price)}")


def page_my_bookings(ctx):
    st.title("📅 我的最近预订")
    try:
        rows = ReservationService.recent_bookings(ctx)
    except HotelError as e:
        st.error(str(e))
        return
    if not rows:
        st.info("暂无预订记录")
        return
    st.dataframe(pd.DataFrame([{
        "酒店": r["hotel"], "房间": r["room"], "价格": format_money(r["price"]),
        "日期": r["date"].strftime("%m/%d/%Y")
    } for r in rows]), use_container_width=True)
